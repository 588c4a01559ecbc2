from setuptools import find_packages, setup

setup(
    name="helperbot",
    version="0.1.0",
    description="Chat helper bot with versioned tags and GitHub issue/PR reference expansion",
    packages=find_packages(include=["helperbot", "helperbot.*"]),
    include_package_data=True,
    python_requires=">=3.11",
    install_requires=[
        "pydantic>=2.5",
        "PyYAML>=6.0",
    ],
    extras_require={
        "server": ["fastapi>=0.110", "uvicorn>=0.27"],
        "test": ["pytest>=7.4", "fastapi>=0.110", "httpx>=0.27"],
    },
    entry_points={"console_scripts": ["helperbot=helperbot.cli:main"]},
)
