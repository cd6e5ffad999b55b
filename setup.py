from setuptools import setup, find_packages

setup(
    name="multiconnect",
    version="0.1.0",
    packages=find_packages(include=["multiconnect", "multiconnect.*"]),
    install_requires=[
        "numpy",
        "gymnasium",  # Environment adapter in multiconnect.game.rules
    ],
    extras_require={
        "test": ["pytest"],
    },
)
