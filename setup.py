import os
from setuptools import setup, find_packages

SETUP_DIR = os.path.dirname(os.path.realpath(__file__))
README_PATH = os.path.join(SETUP_DIR, "README.md")

with open(README_PATH, "r") as readme:
    README = readme.read()

setup(
    name="deps-resolver",
    description="Backtracking resolution of exact library versions from a dependency graph",
    long_description=README,
    long_description_content_type="text/markdown",
    license="LGPL-3.0-or-later",
    version="0.1.0",
    package_dir={"": "src"},
    packages=find_packages("src", exclude=["test"]),
    python_requires=">=3.10",
    install_requires=[
        "graphviz>=0.14.1",
        "networkx>=2.4",
        "pydantic>=2.0",
        "pydantic-settings>=2.5",
        "semantic_version>=2.8.5",
        "tqdm>=4.48.0",
    ],
    extras_require={
        "dev": ["flake8", "pytest", "hypothesis", "mypy>=0.812", "types-setuptools", "types-tqdm"]
    },
    entry_points={
        "console_scripts": [
            "deps-resolver = deps_resolver._cli:main"
        ]
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: GNU Lesser General Public License v3 or later (LGPLv3+)",
        "Programming Language :: Python :: 3 :: Only",
        "Topic :: Software Development :: Build Tools",
        "Topic :: Utilities"
    ]
)
