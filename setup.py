# setup.py
from setuptools import setup, find_packages

install_requires = [
    # --- UI & REACTIVE ---
    # FletXr provides the Rx* reactive primitives (pulls in Flet)
    "FletXr>=0.1.4",

    # --- CONFIG & MODELS ---
    "pydantic>=2.0.0",
    "python-dotenv>=1.0.0",
    "pyyaml>=6.0.0",

    # --- TEXT ---
    "regex>=2023.0",

    # --- TESTS---
    "pytest-asyncio>=0.24",
    "pytest"
]

setup(
    name="Tally",
    version="0.1.0",
    description="Tally|Inventory",
    packages=find_packages(include=["tally", "tally.*"]),
    package_data={"tally": ["shared/config/settings/*.yaml"]},
    include_package_data=True,
    install_requires=install_requires,
    entry_points={"console_scripts": ["tally=tally.app.main:main"]},
    python_requires=">=3.11",
)
