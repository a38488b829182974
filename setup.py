"""Setup script for the picasso SDK package."""
from setuptools import setup, find_packages

setup(
    name="picasso-discord-sdk",
    version="1.0.0",
    description="Webhook responder and REST client for Discord interaction bots",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.9",
    install_requires=[
        "flask[async]>=2.2",
        "asgiref>=3.2",
        "functions-framework>=3.0",
        "httpx>=0.24",
        "PyNaCl>=1.5",
        "opentelemetry-api>=1.20",
        "opentelemetry-sdk>=1.20",
        "opentelemetry-exporter-gcp-trace>=1.6",
        "opentelemetry-instrumentation-flask>=0.41b0",
        "opentelemetry-instrumentation-httpx>=0.41b0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "pytest-asyncio>=0.21",
        ],
    },
)
