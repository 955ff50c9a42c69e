# --------------------------------------------------------------
# File: Home.py
# Description: Define la página principal de Streamlit con el resumen del flujo.
# --------------------------------------------------------------

import streamlit as st

from core import engine

# Inicialización única de proveedores criptográficos del proceso.
engine.init_providers()

# Configura los metadatos de la página principal de la aplicación.
st.set_page_config(page_title="Cipher Vault", page_icon="🔐", layout="centered")

# Presenta el nombre del producto y su propósito general.
st.title("🔐 Cipher Vault")
st.write("Cifra mensajes con AES, DES, ChaCha20 o RSA y guárdalos en tu bóveda personal.")
st.info("Primero ve a **Registro y Login** para crear tu cuenta e iniciar sesión.")
st.warning(
    "ChaCha20 no autentica los datos: un mensaje alterado se descifra sin avisar. "
    "DES se mantiene solo por compatibilidad."
)
