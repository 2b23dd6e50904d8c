"""계산서 HTTP API"""
