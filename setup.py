from setuptools import setup, find_packages
import os

install_requires = ["pydantic>=2.0"]

# Define optional dependencies for development
extras_require = {"dev": ["pytest"]}

setup(
    name="splax",
    version="0.1.0",
    packages=find_packages(where=".", exclude=["tests", "tests.*", "*.tests", "*.tests.*"]),
    python_requires=">=3.10",
    install_requires=install_requires,
    extras_require=extras_require,
    entry_points={
        "console_scripts": [
            "splax = splax.cli:main",
        ],
    },
    include_package_data=True,
    package_data={},
    description="Lexer, parser and scope model for the Splax scripting language.",
    long_description=open("README.md").read() if os.path.exists("README.md") else "",
    long_description_content_type="text/markdown",
)
