"""GraphQL API feature: schema, resolvers, loaders and FastAPI router."""
