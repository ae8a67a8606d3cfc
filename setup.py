"""Setup configuration for the einstein-puzzle package."""

from setuptools import find_packages, setup

setup(
    name="einstein-puzzle",
    version="0.1.0",
    packages=find_packages(include=["einstein_puzzle", "einstein_puzzle.*", "app", "app.*"]),
    python_requires=">=3.9",
    install_requires=[
        "numpy",
        "pillow>=9.1",
        "pydantic>=2",
        "pydantic-settings",
        "fastapi",
        "uvicorn",
        "python-multipart",
    ],
    extras_require={
        "dev": [
            "pytest",
            "pytest-cov",
            "httpx",
            "black",
            "flake8",
            "mypy",
            "isort",
        ],
    },
)
