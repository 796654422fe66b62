"""HTTP interface: dependencies, routers and exception handlers."""
