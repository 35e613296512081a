from setuptools import setup, find_packages

setup(
    name="fourth-protocol",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.11",  # tomllib
    install_requires=[
        "numpy",
        "gymnasium",  # Gymnasium environment in fourth_protocol.game.rules
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "fourth-protocol=fourth_protocol.interfaces.cli:main",
        ],
    },
)
