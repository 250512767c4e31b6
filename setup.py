# setup.py - Fibonacci tangle evaluator
from setuptools import setup, find_packages

setup(
    name="fibtangle",
    version="0.1.0",
    description="Evaluate ascii tangles into Fibonacci anyon matrices over Z/521Z",
    packages=find_packages(include=["fibtangle", "fibtangle.*"]),
    python_requires=">=3.8",
    install_requires=[
        "numpy",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "fibtangle=fibtangle.cli:main",
        ],
    },
)
