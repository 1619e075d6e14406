"""Core configuration, security and observability"""
