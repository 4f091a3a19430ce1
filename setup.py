"""Build script for lambdaboost.

Usage:
    pip install -e .          # editable install
    pip install -e .[test]    # with the test dependencies
"""

from setuptools import setup, find_packages

setup(
    name="lambdaboost",
    version="0.1.0",
    description="LambdaMART pair weighting and pairwise ranking objectives "
                "for gradient-boosted trees",
    python_requires=">=3.8",
    install_requires=[
        "numpy",
        "scikit-learn",
    ],
    extras_require={
        "test": ["pytest"],
    },
    packages=find_packages(exclude=["tests", "tests.*"]),
)
