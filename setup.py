from setuptools import setup, find_packages
import re

# Read version from dayboard/__init__.py
with open('dayboard/__init__.py') as f:
    version = re.search(r'^__version__ = ["\']([^"\']+)["\']', f.read(), re.MULTILINE).group(1)

setup(
    name='dayboard',
    version=version,
    packages=find_packages(include=['dayboard', 'dayboard.*']),
    package_data={
        'dayboard': ['data/*.yaml', 'data/tax-rules/*.yaml'],
    },
    install_requires=[
        'PyYAML>=6.0',
        'click>=8.0',
        'pydantic>=2.0.0',
        'rich>=13.0',
    ],
    extras_require={
        'mcp': [
            'mcp[cli]>=1.0.0,<2',
        ],
        'test': [
            'pytest>=7.0',
        ],
    },
    entry_points={
        'console_scripts': [
            'dayboard=dayboard.cli.__main__:main',
            'dayboard-mcp=dayboard.mcp.server:run_server',
        ],
    },
    author='Personal',
    description='Personal dashboard tools: take-home pay estimates and subscription detection.',
    python_requires='>=3.10',
)
