from setuptools import setup, find_packages

setup(
    name='causal-graph-explorer',
    version='1.0.0',
    description='Interaction and state engine for an evidence-backed biomedical knowledge graph explorer',
    packages=find_packages(exclude=['tests', 'tests.*']),
    install_requires=[
        'rdflib>=6.0.0',
        'lxml>=4.9',
    ],
    extras_require={
        'test': [
            'pytest>=7.0',
        ],
    },
    entry_points={
        'causal_graph_explorer.data_source': [
            'json = data_source_plugin_json.plugin:JsonDataSourcePlugin',
            'rdf_turtle = data_source_plugin_rdf.plugin:RDFTurtleDataSourcePlugin',
            'graphml = data_source_plugin_xml.plugin:GraphMLDataSourcePlugin',
        ],
    },
    python_requires='>=3.10',
)
