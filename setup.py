"""
Setup file for userbench
Installs the fixture package and its console scripts
"""

from setuptools import setup, find_packages

setup(
    name="userbench",
    version="1.0.0",
    packages=find_packages(exclude=("tests", "tests.*")),
    python_requires=">=3.8",
    install_requires=[
        'flask>=2.3.0',
        'werkzeug>=2.3.0',
        'requests>=2.31.0',
        'click>=8.1.0',
    ],
    extras_require={
        'test': [
            'pytest>=7.4.0',
        ],
    },
    entry_points={
        'console_scripts': [
            'userbench-users=userbench.cli:users',
            'userbench-hello=userbench.cli:hello',
            'userbench-load=userbench.cli:load',
        ],
    },
)
