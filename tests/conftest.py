# tests/conftest.py
"""
Shared test fixtures.
Stub graph: KRAS G12C signalling pathway with 7 nodes, 7 edges, 3 clusters.
Five causal edges (one INHIBITS, four ACTIVATES) and two associative ones.
"""
import pytest

from explorer_api.models.cluster import GraphCluster
from explorer_api.models.edge import GraphEdge, Provenance
from explorer_api.models.graph import GraphStore
from explorer_api.models.node import GraphNode, Position
from explorer_api.models.session import SessionState
from explorer_api.types import EdgeType, NodeType

from explorer_core.explorer_platform.config import PlatformConfig
from explorer_core.explorer_platform.workspace import Workspace
from explorer_core.services.bookmark_service import ViewBookmarkManager


# ── Node definitions ─────────────────────────────────────────────
_NODES = [
    ("n1", "AMG-510 (Sotorasib)", NodeType.COMPOUND, 100, 300,
     "First-in-class KRAS G12C inhibitor used for non-small cell lung cancer."),
    ("n2", "KRAS G12C", NodeType.PROTEIN, 300, 300,
     "Oncogenic mutant form of KRAS GTPase where Glycine is replaced by Cysteine at codon 12."),
    ("n3", "RAF1", NodeType.PROTEIN, 500, 200,
     "Proto-oncogene, serine/threonine-protein kinase that is part of the ERK signaling pathway."),
    ("n4", "PI3K", NodeType.PROTEIN, 500, 400,
     "Phosphatidylinositol 3-kinase involved in cell growth, proliferation, differentiation, and motility."),
    ("n5", "MEK1/2", NodeType.PROTEIN, 700, 200,
     "Mitogen-activated protein kinase kinase enzymes that phosphorylate MAPK/ERK."),
    ("n6", "ERK1/2", NodeType.PROTEIN, 900, 200,
     "Extracellular signal-regulated kinases, key effectors in the MAPK/ERK pathway."),
    ("n7", "Tumor Proliferation", NodeType.PHENOTYPE, 900, 400,
     "Uncontrolled rapid cell growth and division characterizing malignant tumors."),
]

# ── Edge definitions ─────────────────────────────────────────────
_EDGES = [
    ("e1", "n1", "n2", EdgeType.INHIBITS, 0.99,
     ("The clinical KRAS(G12C) inhibitor AMG 510 drives anti-tumour immunity",
      "Canon et al.", "2019", "PMC6858556",
      "AMG 510 covalently modifies the cysteine 12 residue of KRAS(G12C) and inhibits downstream signaling.")),
    ("e2", "n2", "n3", EdgeType.ACTIVATES, 0.95,
     ("RAS-RAF-MEK-ERK signaling pathway", "McCubrey et al.", "2007", "PMC1854955",
      "GTP-bound RAS recruits and activates RAF kinases at the plasma membrane.")),
    ("e3", "n2", "n4", EdgeType.ACTIVATES, 0.92,
     ("Ras signaling and transforming function", "Castellano et al.", "2011", "PMC3128630",
      "Ras creates a binding site for the p110 subunit of PI3K, stimulating its lipid kinase activity.")),
    ("e4", "n3", "n5", EdgeType.ACTIVATES, 0.98,
     ("RAF kinases: function, regulation and role in human cancer", "Matallanas et al.", "2011",
      "PMC3074211", "Activated RAF phosphorylates and activates MEK1 and MEK2.")),
    ("e5", "n5", "n6", EdgeType.ACTIVATES, 0.98,
     ("MEK1/2 signaling", "Roskoski Jr.", "2012", "PMC3348123",
      "MEK1/2 are dual-specificity protein kinases that phosphorylate ERK1/2.")),
    ("e6", "n6", "n7", EdgeType.ASSOCIATED_WITH, 0.85,
     ("ERK signaling in cancer", "Samatar et al.", "2014", "PMC4340032",
      "Hyperactivation of ERK promotes cell cycle progression and proliferation.")),
    ("e7", "n4", "n7", EdgeType.ASSOCIATED_WITH, 0.88,
     ("PI3K pathway in cancer", "Liu et al.", "2009", "PMC2782343",
      "PI3K/AKT signaling is a key driver of cell growth and survival.")),
]

# ── Cluster definitions ──────────────────────────────────────────
_CLUSTERS = [
    ("c1", "Target Engagement", ("n1", "n2"), "emerald"),
    ("c2", "Signal Transduction", ("n3", "n4", "n5", "n6"), "blue"),
    ("c3", "Pathology", ("n7",), "red"),
]


def build_nodes():
    return [GraphNode(nid, label, ntype, Position(x, y), desc)
            for nid, label, ntype, x, y, desc in _NODES]


def build_edges():
    return [GraphEdge(eid, src, tgt, etype, conf, Provenance(*prov))
            for eid, src, tgt, etype, conf, prov in _EDGES]


def build_clusters():
    return [GraphCluster(cid, label, members, color) for cid, label, members, color in _CLUSTERS]


def build_store(graph_id: str = "kras_g12c") -> GraphStore:
    return GraphStore(build_nodes(), build_edges(), build_clusters(), graph_id=graph_id)


class CountingIds:
    """Deterministic view id factory: v1, v2, ..."""

    def __init__(self):
        self.count = 0

    def __call__(self) -> str:
        self.count += 1
        return f"v{self.count}"


# ── Pytest fixtures ──────────────────────────────────────────────

@pytest.fixture
def store() -> GraphStore:
    """Full KRAS graph: 7 nodes, 7 edges, 3 clusters."""
    return build_store()


@pytest.fixture
def state() -> SessionState:
    """Initial session state (equals the default view)."""
    return SessionState()


@pytest.fixture
def bookmarks(store) -> ViewBookmarkManager:
    return ViewBookmarkManager(store, id_factory=CountingIds())


@pytest.fixture
def workspace(store) -> Workspace:
    """Workspace over the KRAS graph with deterministic view ids."""
    return Workspace(
        store,
        data_source="memory",
        name="KRAS",
        config=PlatformConfig(),
        bookmarks=ViewBookmarkManager(store, id_factory=CountingIds()),
    )


@pytest.fixture
def nodes():
    return build_nodes()


@pytest.fixture
def edges():
    return build_edges()


@pytest.fixture
def clusters():
    return build_clusters()
