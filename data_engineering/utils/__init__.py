"""Shared validation utilities"""
