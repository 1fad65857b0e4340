"""Setup script for package-tracking following Cosmic Python pattern."""

from setuptools import setup, find_namespace_packages

setup(
    name="package-tracking",
    version="1.0.0",
    description="Package tracking service - public shipment lookup and admin tracking management",
    author="Package Tracking Team",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["tracking", "tracking.*"]),
    py_modules=["config"],
    python_requires=">=3.11",
    install_requires=[
        "fastapi",
        "uvicorn[standard]",
        "pydantic>=2",
        "sqlalchemy>=2",
        "psycopg2-binary",
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-cov",
            "httpx",
        ],
        "dev": [
            "black",
            "flake8",
            "mypy",
            "pre-commit",
        ],
    },
    entry_points={
        "console_scripts": [
            "tracking-api=tracking.entrypoints.tracking_api:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3.11",
        "Topic :: Office/Business",
    ],
)
