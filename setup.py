# setup.py
from setuptools import setup, find_packages

setup(
    name="robots_protocol",
    version="0.1.0",
    description="Lenient robots.txt and X-Robots-Tag parser with standard-compliant path matching",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "click>=8.1",
        "pydantic>=2.0",
        "PyYAML>=6.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": [
            "robots-protocol=robots_protocol.cli:cli",
        ],
    },
    python_requires=">=3.11",
)
