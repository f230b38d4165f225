# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="testreader",
    version="0.1.0",
    description="Compiles test definition files into per-browser, execution-ready test lists",
    python_requires=">=3.8",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["testreader", "testreader.*"]),
    install_requires=[],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    entry_points={
        'console_scripts': [
            'testreader=testreader.interface.cli.app:main',  # Compile definition files from the shell
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
