from __future__ import annotations
import pandas as pd
import pydeck as pdk

# RGBA per survey season
COLOR = {
    "Spring": [34, 139, 34, 200],   # green
    "Fall":   [178, 34, 34, 200],   # red
    "other":  [120, 120, 120, 160], # gray
}


def render_center_map(centers: pd.DataFrame) -> pdk.Deck:
    """
    Plot biomass-weighted species centres by season and decade.
    Expects columns: season, decade, lat, lon, total_biomass.
    """
    pts = centers.dropna(subset=["lat", "lon"]).copy()
    pts["fill_color"] = pts["season"].map(lambda s: COLOR.get(s, COLOR["other"]))
    pts["label"] = pts["season"].astype(str) + " " + pts["decade"].astype(str) + "s"

    layer = pdk.Layer(
        "ScatterplotLayer",
        pts,
        get_position="[lon, lat]",
        get_fill_color="fill_color",
        get_radius=8000,
        radius_min_pixels=4,
        pickable=True,
    )
    text = pdk.Layer(
        "TextLayer",
        pts,
        get_position="[lon, lat]",
        get_text="label",
        get_size=12,
        get_pixel_offset=[0, -14],
    )

    if pts.empty:
        view_state = pdk.ViewState(latitude=42.0, longitude=-69.0, zoom=5)
    else:
        view_state = pdk.ViewState(latitude=float(pts["lat"].mean()), longitude=float(pts["lon"].mean()), zoom=5.5)
    tooltip = {
        "html": "<b>{label}</b><br/>Lat: {lat}<br/>Lon: {lon}<br/>Biomass: {total_biomass} kg",
        "style": {"backgroundColor": "rgba(30,30,30,0.9)", "color": "white"},
    }
    return pdk.Deck(layers=[layer, text], initial_view_state=view_state, tooltip=tooltip, map_style=None)
