from setuptools import setup, find_packages


setup(
    name="armorkit",
    version="0.1",
    packages=find_packages(include=["armorkit", "armorkit.*"]),
    description="Strict decoder for ASCII-armored (BEGIN/END, CRC-24) data blocks.",
    author="vercingetorx",
    install_requires=[],
    extras_require={
        "test": [
            "pycryptodomex>=3.23.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "armorkit=armorkit.cli:main",
        ]
    },
)
