from setuptools import setup, find_packages

setup(
    name='slc_tag_importer',
    version='0.1.0',
    description='Import RSLogix 500 symbol CSV exports into a typed node namespace',
    packages=find_packages(exclude=['tests', 'tests.*']),
    python_requires='>=3.9',
    install_requires=[
        'lxml>=4.9.0',
    ],
    extras_require={
        'dev': ['pytest>=7.0'],
        'mcp': ['mcp[cli]>=1.2.0,<2'],
    },
    entry_points={
        'console_scripts': [
            'slc-import-mcp-server=slc_tag_importer.mcp_server:main',
        ],
    },
)
