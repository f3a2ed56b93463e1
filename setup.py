"""
Setup.py script for resumable
"""
from setuptools import setup, find_packages
import os

here = os.path.abspath(os.path.dirname(__file__))
with open(os.path.join(here, 'README.rst'), encoding='utf-8') as f:
    long_description = f.read()

setup(
    name='resumable',
    version='0.3.0',
    description='Suspendable value-producing computations with a pull interface',
    long_description=long_description,

    license='MIT',

    classifiers=[
        'Development Status :: 3 - Alpha',
        'Intended Audience :: Developers',
        'Topic :: Software Development :: Libraries',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3',
    ],
    keywords='coroutine generator greenlet',

    packages=find_packages(include=['resumable', 'resumable.*']),
    python_requires='>=3.8',

    install_requires=['greenlet', 'py'],
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        "console_scripts": [
            "resumable-demo = resumable.demo:main",
        ],
    },
)
