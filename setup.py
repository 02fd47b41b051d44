from setuptools import setup, find_packages

setup(
    name="wellness-backend",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*", "alembic", "alembic.*", "scripts"]),
    python_requires=">=3.10",
    install_requires=[
        "fastapi",
        "uvicorn",
        "sqlalchemy>=2.0,<2.1",
        "alembic",
        "psycopg2-binary",
        "python-jose[cryptography]",
        "passlib[bcrypt]",
        "bcrypt<5",
        "python-dotenv",
        "pydantic>=2",
        "pydantic-settings",
    ],
    extras_require={
        "test": [
            "pytest",
            "httpx",
        ],
    },
)
