"""DB Layer — ORM-facing pieces: the Searchable mixin."""
