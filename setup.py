from setuptools import setup, find_packages

setup(
    name="govtoken",
    version="0.1.0",
    description="Fungible token ledger with governance-controlled minting (CLI/API)",
    python_requires=">=3.9",
    packages=find_packages(include=["govtoken", "govtoken.*"]),
    install_requires=["pyyaml>=6.0.0"],
    extras_require={
        "api": ["fastapi>=0.110.0", "uvicorn>=0.23.0"],
        "dev": ["pytest>=7.4.0", "fastapi>=0.110.0", "uvicorn>=0.23.0", "httpx>=0.24.0"],
    },
    entry_points={"console_scripts": ["govtoken=govtoken.cli:main"]},
    keywords=["token", "ledger", "governance", "minting", "cli"],
    license="Apache-2.0",
)
