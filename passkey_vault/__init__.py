"""Passkey NFT Vault chainhook processing service."""
