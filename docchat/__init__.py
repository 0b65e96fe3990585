"""docchat: retrieval-augmented chat over an Azure Cognitive Search index."""
