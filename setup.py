from setuptools import setup, find_packages

setup(
    name='apo2cdsp',
    version='1.0.0',
    description='Convert EqualizerAPO parametric EQ exports to cDSP Parametric EQ settings',
    packages=find_packages(exclude=['tests', 'tests.*']),
    python_requires='>=3.8',
    install_requires=[
        'numpy',
        'tkinterdnd2',
    ],
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': [
            'apo2cdsp=apo2cdsp:main',
        ],
        'gui_scripts': [
            'apo2cdsp-gui=apo2cdsp.gui:main',
        ],
    },
)
