"""Script de setup pour faciliter l'installation."""

from setuptools import setup, find_packages

setup(
    name="flight-pricing-search",
    version="1.0.0",
    description="Recherche de vols aller-retour avec validation des dates, remise et tri par prix",
    author="Your Name",
    packages=find_packages(exclude=["tests", "tests.*"]),
    py_modules=["main"],
    install_requires=[
        "aiohttp>=3.9.0",
        "pyyaml>=6.0.1",
        "python-dotenv>=1.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4.0",
            "pytest-asyncio>=0.21.0",
        ],
    },
    python_requires=">=3.11",
)
