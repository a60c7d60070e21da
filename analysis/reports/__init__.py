"""Report generation"""
