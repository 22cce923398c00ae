"""Listings: Streamlit operator console entry point."""

import streamlit as st

from api_client import BASE_URL, list_offers

st.set_page_config(
    page_title="Listings",
    layout="wide",
    initial_sidebar_state="expanded",
)

st.title("Listings")
st.caption(f"Backend: {BASE_URL}")

st.markdown(
    """
Use the pages in the sidebar to:

- **Submit Offer**: fill in an offer, attach an avatar and previews, and see
  the validation result exactly as the API reports it.
- **Browse Offers**: page through stored offers, newest first, and seed demo data.
"""
)

try:
    latest = list_offers(skip=0, limit=5)
    st.subheader("Latest offers")
    if latest["data"]:
        for offer in latest["data"]:
            st.markdown(
                f"- **{offer['title']}** ({offer['type']}, {offer['price']}) by {offer['name']}"
            )
    else:
        st.info("No offers yet.")
except Exception as e:
    st.error(f"Backend unavailable: {e}")
