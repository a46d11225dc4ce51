"""Service Layer — orchestrates core logic around provider IO."""
