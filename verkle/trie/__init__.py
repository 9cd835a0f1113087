"""Trie metadata records for stems and branches, and the trie's errors."""