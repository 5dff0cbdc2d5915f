from setuptools import setup, find_packages
import re

# Read version from buelldocs/__init__.py
with open('buelldocs/__init__.py') as f:
    version = re.search(r'^__version__ = ["\']([^"\']+)["\']', f.read(), re.MULTILINE).group(1)

setup(
    name='buelldocs',
    version=version,
    packages=find_packages(include=['buelldocs', 'buelldocs.*']),
    package_data={
        'buelldocs.sdk.taxes': ['rules/*.yaml'],
    },
    install_requires=[
        'PyYAML>=6.0',
        'click>=8.0',
        'pydantic>=2.0.0',
        'rich>=13.0',
    ],
    extras_require={
        'test': [
            'pytest>=7.0',
        ],
    },
    entry_points={
        'console_scripts': [
            'buelldocs=buelldocs.cli.__main__:main',
        ],
    },
    author='Personal',
    description='Pay stub and bank statement figure generator.',
    python_requires='>=3.10',
)
