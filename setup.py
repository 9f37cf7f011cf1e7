from setuptools import setup, find_packages

setup(
    name="fpl_league_tracker",
    version="0.1.0",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        "python-dotenv",
        "requests"
    ],
    extras_require={
        "test": ["pytest"]
    },
    python_requires=">=3.9",
)
