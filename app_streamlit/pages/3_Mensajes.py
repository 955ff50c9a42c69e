# --------------------------------------------------------------
# File: 3_Mensajes.py
# Description: Listado paginado de mensajes con búsqueda, descifrado y borrado.
# --------------------------------------------------------------

import streamlit as st

from api.services import decrypt_message, delete_user_message, list_user_messages, user_stats
from core import config, engine

engine.init_providers()

st.title("📬 Mis mensajes")

uc = st.session_state.get("user_ctx")
if not uc or "username" not in uc:
    st.warning("Inicia sesión primero en la página de **Registro y Login**.")
    st.stop()

owner = uc["username"]

stats = user_stats(owner)
if stats.ok:
    st.metric("Mensajes guardados", stats.data["total_messages"])

search = st.text_input("Buscar por título")
page = st.number_input("Página", min_value=0, value=0, step=1)
listing = list_user_messages(owner, page=int(page), size=config.page_size(), search=search)

data = listing.data
st.caption(f"Página {data['page'] + 1} de {max(data['total_pages'], 1)} · {data['total_elements']} mensajes")

for item in data["content"]:
    with st.expander(f"#{item['id']} · {item['title']} · {item['algorithm']} · {item['created_at']}"):
        st.code(item["ciphertext"])
        key = st.text_input("Clave (Base64)", type="password", key=f"key_{item['id']}")
        col_dec, col_del = st.columns(2)
        if col_dec.button("Descifrar", key=f"dec_{item['id']}"):
            result = decrypt_message(owner, item["id"], key)
            if result.ok:
                st.success(result.data["decrypted_message"])
            else:
                st.error(f"[{result.error_kind or result.status}] {result.error}")
        if col_del.button("Eliminar", key=f"del_{item['id']}"):
            result = delete_user_message(owner, item["id"])
            if result.ok:
                st.rerun()
            else:
                st.error(result.error)
