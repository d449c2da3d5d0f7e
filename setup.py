from setuptools import setup, find_packages
import re

# Read version from payschedule/__init__.py
with open('payschedule/__init__.py') as f:
    version = re.search(r'^__version__ = ["\']([^"\']+)["\']', f.read(), re.MULTILINE).group(1)

setup(
    name='pay-schedule',
    version=version,
    packages=find_packages(include=['payschedule', 'payschedule.*']),
    package_data={
        'payschedule': ['tax_tables/*.yaml'],
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
            'pay-schedule=payschedule.cli.__main__:main',
        ],
    },
    author='Personal',
    description='Pay period schedules with gross, tax and YTD estimates.',
    python_requires='>=3.10',
)
