# setup.py
from setuptools import setup, find_packages

setup(
    name="surf_math",
    version="0.1.0",
    description="Surf-themed linear-system quiz with AI-generated problems and explanations",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.10",
    install_requires=[
        "sympy",
        "openai>=1.40.0",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "surf-math = surf_math.cli:main",
        ],
    },
)
