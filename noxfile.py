"""Nox automation for EventSwing development tasks."""

import nox

# Default sessions to run
nox.options.sessions = ["lint", "test"]


@nox.session(python=["3.11", "3.12", "3.13"])
def test(session: nox.Session) -> None:
    """Run the test suite with coverage."""
    session.install("-e", ".[test]")
    session.run(
        "pytest",
        "--cov=eventswing",
        "--cov-report=term-missing",
        "--cov-fail-under=80",
        "-q",
        *session.posargs,
    )


@nox.session(python="3.11")
def lint(session: nox.Session) -> None:
    """Run linting with ruff and black."""
    session.install("ruff", "black")
    session.run("ruff", "check", ".")
    session.run("black", "--check", ".")


@nox.session(python="3.11")
def typecheck(session: nox.Session) -> None:
    """Run type checking with mypy."""
    session.install("mypy", "pandas-stubs")
    session.install("-e", ".")
    session.run("mypy", "eventswing")


@nox.session(python=False)
def smoke(session: nox.Session) -> None:
    """Run the offline CLI commands without a virtualenv."""
    session.run("python", "-m", "eventswing.cli.main", "--help")
    session.run(
        "python",
        "-m",
        "eventswing.cli.main",
        "score",
        "Company beats estimates, raises guidance",
        "Regulator opens probe into data breach",
    )
    session.log("Smoke test passed!")
