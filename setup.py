"""Package setup for css-urlrev."""

from setuptools import setup, find_packages

setup(
    name="css-urlrev",
    version="1.0.0",
    description="Append content hashes to url() references in CSS for cache-busting",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.10",
    install_requires=[
        "requests>=2.31.0",
        "urllib3>=2.0.0",
        "tinycss2>=1.2.0",
    ],
    extras_require={
        "ui": [
            "tqdm>=4.66.0",
            "colorlog>=6.8.0",
        ],
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "css-urlrev=urlrev.cli:main",
        ],
    },
)
