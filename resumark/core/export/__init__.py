"""Background workers for slow I/O."""
