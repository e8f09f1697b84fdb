"""Wallet credit scoring service."""
