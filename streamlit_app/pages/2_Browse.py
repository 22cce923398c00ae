"""Page 2: Browse Offers, paginated, plus demo data seeding."""

import pandas as pd
import streamlit as st

from api_client import avatar_url, get_offer, list_offers, reset_and_seed, seed_offers

st.header("Browse Offers")

col_skip, col_limit = st.columns(2)
with col_skip:
    skip = st.number_input("Skip", min_value=0, value=0, step=1)
with col_limit:
    limit = st.number_input("Limit", min_value=1, max_value=100, value=20, step=1)

try:
    page = list_offers(skip=int(skip), limit=int(limit))
except Exception as e:
    st.error(f"Error loading offers: {e}")
    st.stop()

st.caption(f"Showing {page['total']} offer(s) from position {page['skip']}")

if page["data"]:
    df = pd.DataFrame(page["data"])
    df["posted"] = pd.to_datetime(df["date"], unit="ms")
    df["features"] = df["features"].apply(", ".join)
    columns = ["date", "posted", "title", "type", "price", "rooms", "name", "checkin", "checkout", "features"]
    st.dataframe(df[columns], use_container_width=True, hide_index=True)

    selected = st.selectbox("Offer details", [o["date"] for o in page["data"]])
    if selected:
        offer = get_offer(selected)
        if offer.get("avatar"):
            st.image(avatar_url(selected), width=96)
        st.json(offer)
else:
    st.info("No offers on this page.")

st.divider()
st.subheader("Demo data")
count = st.number_input("Number of offers", min_value=1, max_value=500, value=20)
col_seed, col_reset = st.columns(2)
with col_seed:
    if st.button("Generate Offers", use_container_width=True):
        result = seed_offers(count=int(count))
        st.success(f"Generated {result['generated']} offers.")
with col_reset:
    if st.button("Reset & Regenerate", use_container_width=True, type="secondary"):
        result = reset_and_seed(count=int(count))
        st.success(f"Store reset. Generated {result['generated']} offers.")
