"""
Binding loading and availability services
"""
