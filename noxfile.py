import os
from pathlib import Path
import nox

nox.options.reuse_existing_virtualenvs = True
nox.options.sessions = ["lint", "unit", "integration"]

# SlotPoll plus its pytest extras
COMMON_DEPS = ["-e", ".[test]"]

# Host settings forwarded so a run can target a real Postgres store
PASSED_ENV_VARS = [
    "SECRET_KEY",
    "ENVIRONMENT",
    "DATABASE_URL",
    "LOG_LEVEL",
]


def _set_env(session):
    """Forward the SlotPoll settings above and put the repo root on PYTHONPATH."""
    session.env["PYTHONPATH"] = str(Path.cwd())
    for var in PASSED_ENV_VARS:
        if var in os.environ:
            session.env[var] = os.environ[var]


@nox.session(name="lint")
def lint(session):
    """Format with isort and black, then flake8 and mypy over the package."""
    _set_env(session)
    session.install("isort", "black", "flake8", "mypy")
    session.run("isort", "slotpoll/", "tests/")
    session.run("black", "slotpoll/", "tests/")
    session.run("flake8", "slotpoll/", "tests/")
    session.run("mypy", "slotpoll/")


@nox.session(name="unit")
def unit(session):
    """
    Engine, store and service tests with coverage.

    ``nox -s unit -- tests/unit/test_engine/test_ranking.py`` narrows the run.
    """
    _set_env(session)
    session.install(*COMMON_DEPS)
    tests = session.posargs or ["tests/unit"]
    session.run(
        "pytest",
        *tests,
        "--maxfail=1",
        "-vv",
        "--tb=short",
        "--cov=slotpoll",
        "--cov-report=term-missing",
        "--cov-report=html:.nox/htmlcov",
        "--cov-report=xml",
        "--cov-fail-under=80",
    )


@nox.session(name="integration")
def integration(session):
    """HTTP tests: auth, polls, members and the voting flow over TestClient."""
    _set_env(session)
    session.install(*COMMON_DEPS)
    tests = session.posargs or ["tests/integration"]
    session.run(
        "pytest",
        *tests,
        "--maxfail=1",
        "-vv",
        "--tb=short",
    )
