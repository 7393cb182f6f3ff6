"""NWS and IEM access: JSON client, forecast and icon helpers, radar imagery."""