"""Test sessions for the storefront.

Markers are assigned from the test directory (see tests/conftest.py), so the
layer sessions select with ``-m`` instead of listing paths.
"""

import nox

PYTHON_VERSIONS = ["3.11", "3.12", "3.13"]

nox.options.sessions = ["tests"]


def _install(session: nox.Session) -> None:
    """Install the storefront and its test extra into the nox virtualenv."""
    session.run(
        "poetry",
        "install",
        "--all-extras",
        external=True,
    )


@nox.session(python=PYTHON_VERSIONS)
def tests(session: nox.Session) -> None:
    """Run the full suite across Python versions."""
    _install(session)
    session.run("pytest", *session.posargs)


@nox.session(python=PYTHON_VERSIONS[-1])
def tests_domain(session: nox.Session) -> None:
    """Aggregates, value objects and pure helpers; no HTTP or file storage."""
    _install(session)
    session.run("pytest", "-m", "domain", *session.posargs)


@nox.session(python=PYTHON_VERSIONS[-1])
def tests_integration(session: nox.Session) -> None:
    """FastAPI routes, the file-backed cart storage and the BDD features."""
    _install(session)
    session.run("pytest", "-m", "integration", *session.posargs)
