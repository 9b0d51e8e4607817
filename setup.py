"""
Setup script for odesolve package.
"""

from setuptools import setup, find_packages
import os

# Read README file
def read_readme():
    readme_path = os.path.join(os.path.dirname(__file__), 'README.md')
    if os.path.exists(readme_path):
        with open(readme_path, 'r', encoding='utf-8') as f:
            return f.read()
    return ""

# Read requirements
def read_requirements():
    req_path = os.path.join(os.path.dirname(__file__), 'requirements.txt')
    if os.path.exists(req_path):
        with open(req_path, 'r') as f:
            return [line.strip() for line in f if line.strip() and not line.startswith('#')]
    return ["numpy>=1.25", "psutil>=5.8", "matplotlib>=3.5"]

setup(
    name="odesolve",
    version="0.1.0",
    author="odesolve Contributors",
    description="Fixed-step ODE integration (Euler, Heun, RK4) over in-place trajectory buffers",
    long_description=read_readme(),
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Science/Research",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Scientific/Engineering :: Mathematics",
        "Topic :: Scientific/Engineering :: Physics",
    ],
    python_requires=">=3.9",
    install_requires=read_requirements(),
    extras_require={
        "hdf5": ["h5py>=3.0"],
        "test": ["pytest>=7.0"],
        "dev": ["pytest>=7.0", "black", "flake8"],
        "all": ["h5py>=3.0", "pytest>=7.0", "black", "flake8"],
    },
    entry_points={
        "console_scripts": [
            "odesolve=odesolve.__main__:main",
        ],
    },
    keywords="ode, runge-kutta, euler, heun, lorenz96, numerical integration",
    include_package_data=True,
)
