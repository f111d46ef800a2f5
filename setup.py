from setuptools import find_packages, setup

if __name__ == "__main__":
    setup(
        name="sigutil",
        version="0.1.0",
        description="EIP-712 typed-data hashing and Ethereum message signing utilities",
        packages=find_packages(where="src"),
        package_dir={"": "src"},
        python_requires=">=3.9",
        install_requires=["jsonschema>=4"],
        extras_require={"test": ["pytest>=7"]},
    )
