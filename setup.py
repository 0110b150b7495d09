from setuptools import find_packages, setup


setup(
    name="coo",
    version="0.1.0",
    python_requires=">=3.10",
    packages=find_packages(exclude=["tests", "tests.*"]),
    license="MIT",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    package_data={"coo": ["py.typed"]},
    install_requires=[
        "py-algorand-sdk>=2.0.0",
        "httpx>=0.24",
        "rich>=13.0",
        "base58>=2.1",
    ],
    extras_require={"test": ["pytest>=7.0"]},
    entry_points={"console_scripts": ["coo=coo.cli:main"]},
)
