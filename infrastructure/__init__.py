"""Infrastructure adapters: table store, repositories, audit logging."""
