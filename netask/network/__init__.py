from .loader import dump_network, load_network, network_from_text
from .network import Network, NodeView
