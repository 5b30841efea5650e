# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="json_env",
    version="0.4.0",
    description="dotenv, but with JSON: run programs with variables read from .env.json files",
    author="Enrique Paredes",
    author_email="eparedesbalen@gmail.com",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["json_env", "json_env.*"]),
    python_requires=">=3.9",
    install_requires=[
        "jsonpath-ng>=1.5.3",  # Path expressions for --path
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        'console_scripts': [
            'json_env=json_env.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
