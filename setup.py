from setuptools import setup, find_packages

with open("README.md", "r") as fh:
    long_description = fh.read()

reqs = [
    "click>=8.1",
    "pydantic>=2.0",
    "pydantic-settings>=2.3",
    "pytz",
    "pyyaml",
    "rich",
    "structlog>=24.1",
]

setup(
    name="helpgroups",
    version="0.1.0",
    description="Categorized help output for command-line applications with many flags.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    install_requires=reqs,
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    extras_require={
        'test': ['pytest', 'pytest-cov'],
    },
    entry_points={
        'console_scripts': [
            'helpgroups = helpgroups.cli.__main__:cli',
            'helpgroups-demo = helpgroups.sample:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
        "License :: OSI Approved :: Apache Software License",
        "Development Status :: 2 - Pre-Alpha"
    ],
    python_requires='>=3.10',
)
