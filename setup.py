from setuptools import setup, find_packages


setup(
    name="hashrng",
    version="0.1",
    packages=find_packages(include=["hashrng", "hashrng.*"]),
    description="Deterministic CSPRNG byte streams derived from arbitrary-size seeds via a cryptographic hash.",
    python_requires=">=3.8",
    install_requires=[
        "pycryptodomex>=3.23.0",
    ],
)
