from setuptools import find_packages, setup

package_name = 'pursuit_path'

setup(
    name=package_name,
    version='1.0.0',
    packages=find_packages(exclude=['test']),
    install_requires=['setuptools', 'numpy'],
    extras_require={
        'test': ['pytest'],
    },
    python_requires='>=3.8',
    zip_safe=True,
    description='Waypoint to line/arc path compiler with speed profiles for pure pursuit',
    license='MIT',
)
