import nox

PYTHON_VERSIONS = ["3.11", "3.12", "3.13", "3.14"]


def _install(session: nox.Session) -> None:
    """Install the project with its test group into the nox virtualenv."""
    session.run("poetry", "install", "--with", "test", external=True)


@nox.session(python=PYTHON_VERSIONS)
def tests(session: nox.Session) -> None:
    """Run the whole suite; every provider is in memory, so no services are needed."""
    _install(session)
    session.run("pytest", *session.posargs)


@nox.session(python=PYTHON_VERSIONS[0])
def tests_flow(session: nox.Session) -> None:
    """Flow engine and aggregate tests only."""
    _install(session)
    session.run("pytest", "-m", "domain", *session.posargs)


@nox.session(python=PYTHON_VERSIONS[0])
def tests_api(session: nox.Session) -> None:
    """HTTP endpoints and command handlers."""
    _install(session)
    session.run("pytest", "-m", "integration or application", *session.posargs)
