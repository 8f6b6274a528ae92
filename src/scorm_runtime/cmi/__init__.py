"""CMI data model: schema descriptors, tree nodes and path resolution."""
