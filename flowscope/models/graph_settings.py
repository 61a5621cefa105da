"""Display and filter settings for the flow graph."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


LayoutType = Literal[
    "dagre-lr",
    "dagre-tb",
    "dagre-rl",
    "dagre-bt",
    "force",
    "circular",
    "concentric",
    "grid",
    "breadthfirst",
]

EdgeThickness = Literal["thin", "normal", "thick"]


class GraphSettings(BaseModel):
    """every toggle the graph controls expose.

    Only the filter group changes which nodes and edges are shown. The node
    and edge options are passed through to the renderer untouched.
    """

    model_config = ConfigDict(frozen=True)

    layout: LayoutType = "force"

    # node options
    show_labels: bool = True
    size_by_connections: bool = False
    compact_mode: bool = True

    # edge options
    curved_edges: bool = True
    show_arrows: bool = True
    edge_thickness: EdgeThickness = "thin"

    # filters
    show_roots: bool = True
    show_components: bool = True
    show_external: bool = True
    min_connections: int = Field(default=0, ge=0)
    isolate_selected: bool = False


DEFAULT_GRAPH_SETTINGS = GraphSettings()
