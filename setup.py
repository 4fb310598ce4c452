from setuptools import setup, find_packages

setup(
    name="codemend",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "requests",
        "pyyaml",
        "textual",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    entry_points={
        "console_scripts": [
            "codemend=codemend.cli:main",
        ],
    },
    python_requires=">=3.10",
    description="Ask a language model to edit a file and review its changes before applying them.",
)
