"""
Shared helpers for Face Template Migration
"""
