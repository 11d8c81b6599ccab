"""Multi-Cluster Services conformance checks"""
