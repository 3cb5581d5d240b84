"""Domain models for the Nexus client"""
