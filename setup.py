from setuptools import setup, find_packages

# Base requirements - always needed
install_requires = [
    "dbus-python>=1.2.0",
    "PyYAML>=6.0",
]

setup(
    name="blueproxy",
    version="0.3.0",
    description="Typed asyncio proxies for BlueZ adapters over D-Bus",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=install_requires,
    extras_require={
        "test": ["pytest>=8.0.0"],
    },
    entry_points={
        'console_scripts': [
            'blueproxy=blueproxy.cli:main',
        ],
    },
    python_requires='>=3.9',
)
