from __future__ import annotations

from setuptools import find_namespace_packages, setup

setup(
    name="wishlist-service",
    version="0.1.0",
    # Repo convention: backend code lives under `backend/`, imported as top-level
    # layers (`domain`, `application`, `infrastructure`, `server`, `config`).
    package_dir={"": "backend"},
    packages=find_namespace_packages(
        where="backend",
        include=[
            "domain",
            "domain.*",
            "application",
            "application.*",
            "infrastructure",
            "infrastructure.*",
            "server",
            "server.*",
            "config",
            "config.*",
        ],
    ),
    python_requires=">=3.10",
    install_requires=[
        "fastapi>=0.110",
        "uvicorn>=0.27",
        "pydantic>=2.5,<3",
        "python-dotenv>=1.0",
        "aiohttp>=3.9",
    ],
    extras_require={
        # TestClient needs httpx.
        "test": ["pytest>=7.4", "httpx>=0.26"],
    },
)
