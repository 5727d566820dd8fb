import os
import setuptools
import sys

if sys.version_info[0] < 3:
    sys.exit("Tether requires Python 3.")

here = os.path.abspath(os.path.dirname(__file__))
with open(os.path.join(here, 'README.rst'), encoding='utf-8') as f:
    long_description = f.read()

setuptools.setup(
    classifiers=[
        'Development Status :: 4 - Beta',
        'License :: OSI Approved :: MIT License',
        'Intended Audience :: Developers',
        'Programming Language :: Python :: 3 :: Only',
        'Topic :: Database',
    ],
    description='Relationship resolution for a simple PostgreSQL ORM.',
    extras_require={
        'test': ['pytest'],
    },
    install_requires=[
        'msgpack',
        'psycopg2-binary',
    ],
    license='MIT',
    long_description=long_description,
    keywords='orm postgres postgresql relations',
    name='tether',
    packages=setuptools.find_packages(),
    version='0.1.0',
)
