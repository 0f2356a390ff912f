"""
Streamlit dashboard — presentation only; all numbers come from engine/ and pm/.
"""
