from setuptools import setup, find_packages

setup(
    name="project-terminal",
    version="0.1.0",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        "fastapi>=0.110",
        "pydantic>=2.5",
        "structlog>=24.1",
        "PyYAML>=6.0",
        "python-dotenv>=1.0",
        "uvicorn>=0.27",
    ],
    extras_require={
        "test": [
            "pytest>=8.0",
            "pytest-asyncio>=0.23",
            "httpx>=0.27",
        ],
    },
    entry_points={
        "console_scripts": [
            "project-terminal=project_terminal.core.cli:main",
        ],
    },
    description="Slash-command terminal for project-management data.",
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.10",
)
