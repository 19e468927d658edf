from setuptools import setup


setup(
    name='rpncalc',
    use_scm_version={'fallback_version': '0.1.0'},
    description='RPN calculator core: number formats and undoable stack',
    install_requires=[
        'regex',
    ],
    packages=['rpncalc'],
    package_dir={'': 'src'},
    include_package_data=True,
    zip_safe=False,
    classifiers=[
        "Programming Language :: Python :: 3",
    ],
    setup_requires=[
        'setuptools_scm',
    ],
    extras_require={
        'test': [
            'pytest',
            'pytest-cov',
            'coverage',
            'flake8',
            'bandit',
            'mypy',
            'safety',
        ],
    },
    license='ISC',
)
