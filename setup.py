import setuptools

setuptools.setup(
    name='simparams',
    version='0.1',
    license='MIT',
    zip_safe=False,
    packages=setuptools.find_packages(include=['simparams', 'simparams.*']),
    python_requires='>=3.8',
    install_requires=[
        'rich', 'rapidfuzz'
    ],
    extras_require={
        'test': ['pytest'],
    },
    description='Registry of runtime parameters for simulation programs: registration, parameter files, command line and help output.',
)
