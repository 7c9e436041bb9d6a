import setuptools

with open("README.md", "r") as fh:
    long_description = fh.read()

setuptools.setup(
    name="rdsprobe",
    version="0.1.0",
    author="rdsprobe authors",
    description="Reachability and send-latency probe for RDS (Reliable Datagram Sockets)",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=setuptools.find_packages(include=['rdsprobe', 'rdsprobe.*']),
    install_requires=[
        'netifaces~=0.11.0',
        'prettytable>=3.0',
    ],
    extras_require={
        'test': ['pytest'],
    },
    classifiers=[
        "Environment :: Console",
        "Intended Audience :: System Administrators",
        "Operating System :: POSIX :: Linux",
        "Topic :: System :: Networking :: Monitoring",

        "Programming Language :: Python :: 3",
        'Programming Language :: Python :: 3 :: Only',
        "Typing :: Typed",
    ],
    python_requires='>=3.7',
    entry_points={
        'console_scripts': [
            'rdsprobe=rdsprobe.run:main'
        ]
    },
)
