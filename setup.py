"""Setup configuration for gitvaluation"""

from setuptools import setup, find_packages

setup(
    name="gitvaluation",
    version="0.1.0",
    description=(
        "Score developer contributions from merged GitHub pull requests "
        "with a language model."
    ),
    author="GitValuation Contributors",
    author_email="",
    python_requires=">=3.10",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    install_requires=[
        "requests>=2.28.0",
        "openai>=1.55.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0",
            "black>=22.0",
            "flake8>=4.0",
            "mypy>=0.950",
        ],
    },
    entry_points={
        "console_scripts": [
            "gitvaluation=gitvaluation.main:main",
        ],
    },
)
