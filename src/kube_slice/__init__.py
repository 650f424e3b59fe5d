"""Split multi-document Kubernetes YAML into individually named files."""

__version__ = "0.4.0"
