"""Graph, path and search building blocks for bidijkstra."""
