# explorer_core/services/reference_links.py
"""
    DefaultReferenceLinks — external database searches for a node.

    Links are plain URL templates; nothing is fetched or validated.
"""
from typing import List, Tuple
from urllib.parse import quote

from explorer_api.models.node import GraphNode
from explorer_api.plugins.base import ReferenceLink, ReferenceLinkProvider
from explorer_api.types import NodeType

# Characters left unescaped by JavaScript's encodeURIComponent
_SAFE_CHARS = "-_.!~*'()"

_PROTEIN_LINKS: Tuple[Tuple[str, str], ...] = (
    ("UniProt", "https://www.uniprot.org/uniprotkb?query={label}"),
    ("NCBI Gene", "https://www.ncbi.nlm.nih.gov/gene/?term={label}"),
    ("AlphaFold DB", "https://alphafold.ebi.ac.uk/search/text/{label}"),
)

_COMPOUND_LINKS: Tuple[Tuple[str, str], ...] = (
    ("PubChem", "https://pubchem.ncbi.nlm.nih.gov/#query={label}"),
    ("DrugBank", "https://go.drugbank.com/searches?query={label}"),
    ("ChEMBL", "https://www.ebi.ac.uk/chembl/g/#search_results/all/query={label}"),
)

_LITERATURE_LINKS: Tuple[Tuple[str, str], ...] = (
    ("Google Scholar", "https://scholar.google.com/scholar?q={label}"),
    ("PubMed", "https://pubmed.ncbi.nlm.nih.gov/?term={label}"),
)


def encode_label(label: str) -> str:
    return quote(label, safe=_SAFE_CHARS)


class DefaultReferenceLinks(ReferenceLinkProvider):
    """Proteins and compounds get curated databases; everything else gets literature search."""

    def links_for(self, node: GraphNode) -> List[ReferenceLink]:
        if node.type is NodeType.PROTEIN:
            templates = _PROTEIN_LINKS
        elif node.type is NodeType.COMPOUND:
            templates = _COMPOUND_LINKS
        else:
            templates = _LITERATURE_LINKS

        label = encode_label(node.label)
        return [ReferenceLink(name, url.format(label=label)) for name, url in templates]
