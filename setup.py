import os
from setuptools import setup, find_packages

NAME = 'mocatalog'
PACKAGES = find_packages()
DESCRIPTION = 'Compiled gettext catalog (.mo) lookups for Django'
LONG_DESCRIPTION = open(os.path.join(os.path.dirname(__file__), 'README.md')).read()
AUTHOR = 'Potato London Ltd.'

setup(
    name=NAME,
    version='0.1.0',
    packages=PACKAGES,
    include_package_data=True,
    install_requires=[
        'Django>=3.2',
    ],
    extras_require={
        'test': ['pytest', 'polib>=1.1.0'],
    },
    # metadata for upload to PyPI
    author=AUTHOR,
    description=DESCRIPTION,
    long_description=LONG_DESCRIPTION,
    long_description_content_type='text/markdown',
    keywords=["django", "translation", "gettext", "mo"],
    classifiers=[
        'Development Status :: 3 - Alpha',
        'Framework :: Django',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: MIT License',
        'Operating System :: OS Independent',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
    ]
)
