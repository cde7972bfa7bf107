# Configuration file adapters
