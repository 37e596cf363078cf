"""Support point placement along the Voronoi skeleton of print islands."""

from .errors import (
    DegenerateNeighborError,
    EmptyLongestPathError,
    MissingContourStartError,
    SupportIslandError,
    UnannotatedInputError,
)
from .longest_path import create_longest_path, search_longest_path
from .paths import (
    Circle,
    ExPath,
    Path,
    SideBranches,
    append_neighbor_branch,
    create_circle,
    merge_connected_circle,
)
from .circles import find_longest_path_on_circle, find_longest_path_on_circles
from .reshape import reshape_longest_path
from .sampling import (
    SampleResult,
    get_center_of_path,
    get_edge_point,
    get_offseted_point,
    sample_island,
    sample_voronoi_graph,
)
from .settings import SampleConfig, load_sample_config
from .skeleton_graph import (
    Neighbor,
    Node,
    SkeletonGraph,
    build_skeleton_graph,
    get_neighbor,
    get_neighbor_distance,
)
from .voronoi import (
    EdgeCategory,
    Line,
    VertexCategory,
    VoronoiDiagram,
    load_diagram,
)

__all__ = [
    "VertexCategory",
    "EdgeCategory",
    "Line",
    "VoronoiDiagram",
    "load_diagram",
    "Node",
    "Neighbor",
    "SkeletonGraph",
    "build_skeleton_graph",
    "get_neighbor",
    "get_neighbor_distance",
    "Path",
    "Circle",
    "SideBranches",
    "ExPath",
    "create_circle",
    "merge_connected_circle",
    "append_neighbor_branch",
    "search_longest_path",
    "create_longest_path",
    "find_longest_path_on_circle",
    "find_longest_path_on_circles",
    "reshape_longest_path",
    "SampleConfig",
    "load_sample_config",
    "SampleResult",
    "get_edge_point",
    "get_center_of_path",
    "get_offseted_point",
    "sample_voronoi_graph",
    "sample_island",
    "SupportIslandError",
    "UnannotatedInputError",
    "MissingContourStartError",
    "DegenerateNeighborError",
    "EmptyLongestPathError",
]
