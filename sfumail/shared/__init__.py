"""Shared validation helpers"""
