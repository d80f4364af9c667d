from pathlib import Path
from setuptools import setup, find_packages

BASE_DIR = Path(__file__).parent

# ----------------------------------------------------------------------
# Core version & requirements (the library itself)
# ----------------------------------------------------------------------
version = (BASE_DIR / ".version").read_text().strip()
long_description = (BASE_DIR / "README.md").read_text(encoding="utf-8")
requirements_lib = (BASE_DIR / "requirements_lib.txt").read_text().splitlines()

# ----------------------------------------------------------------------
# Web application requirements
# ----------------------------------------------------------------------
requirements_web = (BASE_DIR / "requirements.txt").read_text().splitlines()

# ----------------------------------------------------------------------
# Extras handling
# ----------------------------------------------------------------------
extras = {
    "server": ["gunicorn", "waitress"],
    "test": ["pytest"],
}

# ----------------------------------------------------------------------
setup(
    name="task-lingo",
    version=version,
    description="Task Lingo – multilingual to-do list with LLM translations",
    long_description=long_description,
    long_description_content_type="text/markdown",
    license="Apache-2.0",
    packages=find_packages(
        where=".",
        include=[
            "task_lingo_lib*",
            "task_lingo_web*",
        ],
        exclude=("tests", "docs"),
    ),
    package_data={"task_lingo_web.web": ["templates/*.html"]},
    python_requires=">=3.10",
    install_requires=[r for r in requirements_lib + requirements_web if r.strip()],
    extras_require=extras,
    entry_points={
        "console_scripts": {
            "task-lingo=task_lingo_web.app:main",
        }
    },
)
