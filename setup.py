from setuptools import setup, find_packages

with open('requirements.txt') as f:
    required = f.read().splitlines()

setup(
    name = 'settingskit',
    version = '0.1.0',
    description = 'Validated, persistable settings objects with flat key-value files',
    packages = find_packages(include=['settingskit', 'settingskit.*']),
    python_requires = '>=3.10',
    install_requires = required,
    extras_require = {
        'test': ['pytest', 'pytest-cov'],
    },
)
