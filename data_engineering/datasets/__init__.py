"""Derived dataset builders"""
