"""Namespace for tree-key derivation; it holds no modules in this release."""