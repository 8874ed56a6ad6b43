from setuptools import setup, find_packages

with open('requirements.txt') as f:
    required = [line.strip() for line in f.read().splitlines() if line.strip() and not line.startswith('#')]

setup(
    name = 'model-retriever',
    version = '0.1.0',
    description = 'Cached longest-path lookup and merge of validation models along a resource type hierarchy',
    packages = find_packages(include=['modelretriever', 'modelretriever.*']),
    python_requires = '>=3.11',
    install_requires = required,
    extras_require = {
        'test': [
            'pytest>=7.0',
            'pytest-cov>=4.0',
        ]
    }
)
