# noxfile.py
import nox

nox.options.sessions = "lint", "tests"
locations = "src", "tests", "noxfile.py"


@nox.session()
def tests(session):
    posargs = [
        "--cov=i18n_extraction_tools",
        "--cov-report=xml",
    ]
    session.install("-e", ".[test]")
    session.run("pytest", *posargs, *session.posargs)


@nox.session()
def lint(session):
    args = session.posargs or locations
    session.install(
        "flake8",
        "flake8-black",
        "flake8-bugbear",
        "flake8-import-order",
    )
    session.run("flake8", *args)


@nox.session()
def black(session):
    args = session.posargs or locations
    session.install("black")
    session.run("black", *args)
