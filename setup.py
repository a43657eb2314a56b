from setuptools import setup, find_packages

setup(
    name="neuralcore",
    version="0.1.0",
    author="Amir Alasady",
    author_email="amiralasady107@gmail.com",
    description="A minimal neural network computation core: layers, activations, optimizers and serialization",
    long_description=open('README.md').read(),
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=['tests', 'tests.*']),
    classifiers=[
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.10",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Topic :: Scientific/Engineering :: Artificial Intelligence",
        "Intended Audience :: Science/Research",
    ],
    python_requires='>=3.10',
    install_requires=[
        'numpy>=1.21.0',
    ],
    extras_require={
        # Development tools
        'dev': [
            'pytest>=7.0.0',
            'twine>=4.0.0',
            'flake8>=6.0.0',
            'mypy>=1.0.0'
        ],
        'test': [
            'pytest>=7.0.0',
        ],
    },
)
