from setuptools import find_packages, setup


setup(
    name="interaction-graph-analysis",
    version="0.1.0",
    description="Social interaction graph builder with centrality and community analysis",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    python_requires=">=3.10",
    install_requires=[
        "pydantic>=2.0.0",
        "prometheus-client>=0.17.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "interaction-graph=graph_algorithms.main:main",
        ],
    },
)
