"""Nox sessions for difi development."""

from __future__ import annotations

import nox

nox.options.sessions = ["lint", "typecheck", "tests"]
nox.options.reuse_existing_virtualenvs = True

PYTHON_VERSIONS = ["3.11", "3.12", "3.13"]
SRC = "src/difi"
LINT_TARGETS = [SRC, "tests", "noxfile.py"]


@nox.session(python=False)
def fmt(session: nox.Session) -> None:
    """Format sources and sort imports in place."""
    session.run("ruff", "check", "--select", "I", "--fix", *LINT_TARGETS)
    session.run("ruff", "format", *LINT_TARGETS)


@nox.session(python=False)
def lint(session: nox.Session) -> None:
    """Check style without rewriting anything."""
    session.run("ruff", "format", "--check", *LINT_TARGETS)
    session.run("ruff", "check", *LINT_TARGETS)


@nox.session(python=PYTHON_VERSIONS[0])
def typecheck(session: nox.Session) -> None:
    session.install("-e", ".[dev]")
    session.run("mypy", SRC)


@nox.session(python=PYTHON_VERSIONS)
def tests(session: nox.Session) -> None:
    """Run the test suite against an installed copy of the package."""
    session.install("-e", ".[test]")
    session.run("pytest", *session.posargs)
