"""Application layer: event notification"""
