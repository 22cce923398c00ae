"""Page 1: Submit Offer, as a multipart form with images."""

from datetime import time

import streamlit as st

from api_client import OfferRejected, submit_offer

FEATURES = ["wifi", "dishwasher", "parking", "washer", "elevator", "conditioner"]

st.header("Submit Offer")

with st.form("offer_form"):
    title = st.text_input("Title", placeholder="30 to 140 characters")
    col1, col2 = st.columns(2)
    with col1:
        offer_type = st.selectbox("Type", ["flat", "house", "bungalow", "palace"])
        price = st.number_input("Price", min_value=0, value=30000, step=500)
        rooms = st.number_input("Rooms", min_value=0, value=1, step=1)
        guests = st.number_input("Guests", min_value=0, value=1, step=1)
    with col2:
        name = st.text_input("Author name (optional)")
        address = st.text_input("Address", placeholder="x, y")
        checkin = st.time_input("Checkin", value=time(12, 0))
        checkout = st.time_input("Checkout", value=time(12, 0))

    features = st.multiselect("Features", FEATURES)
    avatar = st.file_uploader("Avatar", type=["png", "jpg", "jpeg", "gif", "webp"])
    previews = st.file_uploader(
        "Previews", type=["png", "jpg", "jpeg", "gif", "webp"], accept_multiple_files=True
    )
    submitted = st.form_submit_button("Submit Offer", use_container_width=True)

if submitted:
    fields = {
        "title": title,
        "type": offer_type,
        "price": str(price),
        "rooms": str(rooms),
        "guests": str(guests),
        "address": address,
        "checkin": checkin.strftime("%H:%M"),
        "checkout": checkout.strftime("%H:%M"),
        "features": features,
    }
    if name.strip():
        fields["name"] = name.strip()

    avatar_file = (avatar.name, avatar.getvalue(), avatar.type) if avatar else None
    preview_files = [(p.name, p.getvalue(), p.type) for p in previews or []]

    try:
        offer = submit_offer(fields, avatar_file, preview_files)
        st.success(f"Offer stored with date **{offer['date']}** by {offer['name']}")
        with st.expander("Stored offer"):
            st.json(offer)
    except OfferRejected as rejected:
        st.error("Offer rejected:")
        for err in rejected.errors:
            st.markdown(f"- `{err['fieldName']}`: {err['errorMessage']}")
    except Exception as e:
        st.error(f"Error: {e}")
