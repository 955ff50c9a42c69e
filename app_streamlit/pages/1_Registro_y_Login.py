# --------------------------------------------------------------
# File: 1_Registro_y_Login.py
# Description: Implementa las vistas de registro y autenticación en Streamlit.
# --------------------------------------------------------------

import streamlit as st

from core import auth

# Presenta el título general de la página.
st.title("👤 Registro y Login")

# Separa la pantalla en pestañas para registro y autenticación.
tab_reg, tab_log = st.tabs(["Registro", "Login"])

# Sección de registro de nuevas cuentas.
with tab_reg:
    username = st.text_input("Usuario", key="reg_user")
    email = st.text_input("Email", key="reg_email")
    password = st.text_input(
        "Contraseña",
        type="password",
        key="reg_pass",
        help=f"Mínimo {auth.MIN_PASSWORD_LENGTH} caracteres.",
    )

    disabled = not (username and email and password)
    if st.button("Crear cuenta", disabled=disabled, key="btn_register"):
        ok, msg = auth.register_user(username, email, password)
        if ok:
            st.success(msg)
        else:
            st.error(msg)

# Sección de inicio de sesión para usuarios existentes.
with tab_log:
    username_l = st.text_input("Usuario", key="log_user")
    password_l = st.text_input("Contraseña", type="password", key="log_pass")

    if st.button("Iniciar sesión", key="btn_login"):
        ok, msg, ctx = auth.login(username_l, password_l)
        if ok:
            st.session_state["user_ctx"] = ctx
            st.success(msg)
        else:
            st.error(msg)

    if st.session_state.get("user_ctx") and st.button("Cerrar sesión", key="btn_logout"):
        st.session_state.pop("user_ctx")
        st.info("Sesión cerrada.")
