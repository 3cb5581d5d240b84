"""Infrastructure layer: HTTP transport"""
