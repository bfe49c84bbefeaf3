from setuptools import setup

setup(
    name='quantum-shots',
    version='0.1.0',
    description='Shot-based statevector simulation of pytket circuits with packed outcome records',
    package_dir={'': 'src'},
    packages=['quantum_shots',
              'quantum_shots._circuit',
              'quantum_shots._gates',
              'quantum_shots._simulation',
              'quantum_shots._translation',
              'quantum_shots._utility'],
    install_requires=[
        'numpy',
        'scipy',
        'opt_einsum',
    ],
    extras_require={
        'mpi': ['mpi4py'],
        'test': ['pytest', 'qiskit'],
    },
    entry_points={
        'console_scripts': ['quantum-shots=quantum_shots.__main__:main'],
    },
    license='MIT',
    python_requires='>=3.9'
)
