from setuptools import setup, find_packages

setup(
    name="billing-portal",
    version="1.0.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "pydantic>=2.0",
        "pydantic-settings>=2.0",
        "httpx>=0.24",
        "python-dotenv>=1.0",
        "supabase>=2.0",
        "tzdata>=2023.3",
        "fastapi>=0.100",
        "uvicorn>=0.20",
        "python-jose>=3.3",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "pytest-asyncio>=0.21",
        ],
    },
    python_requires=">=3.9",
)
