from setuptools import setup

setup(
    name='polyrun',
    version='0.1.0',
    packages=['polyrun'],
    py_modules=['runpolyrun_cmd'],
    license='MIT',
    description='Uniform sampling of convex polytopes with hit-and-run and related random walks',
    long_description='''\
A tool for drawing (approximately) uniform samples from the convex polytope defined by a system of linear inequalities Ax <= b and equalities Cx = d.

Equalities are removed by sampling in the null space of C, an interior start point is found with a linear program maximising the smallest slack, and samples are generated with hit-and-run, ball, sphere or grid walks, with optional thinning of the chain.
''',
    long_description_content_type='text/plain',
    classifiers=[
        'Programming Language :: Python :: 3',
        'License :: OSI Approved :: MIT License',
        'Operating System :: OS Independent',
    ],
    install_requires=[
        'numpy',
        'pandas',
        'scipy',
        'numba'
    ],
    extras_require={
        'test': ['pytest']
    }
)
