# --------------------------------------------------------------
# File: 2_Cifrar.py
# Description: Formulario de cifrado de mensajes y entrega del material de clave.
# --------------------------------------------------------------

import streamlit as st

from api.services import encrypt_message
from core import engine
from core.crypto_asym import RSA_MAX_PLAINTEXT
from core.models import AlgorithmTag

engine.init_providers()

ALGORITHM_HELP = {
    AlgorithmTag.AES: "AES-CBC. Clave opcional de 16, 24 o 32 bytes en Base64; si se omite se genera una de 32.",
    AlgorithmTag.DES: "DES-CBC, heredado. Clave opcional de 8 bytes en Base64.",
    AlgorithmTag.CHACHA20: "ChaCha20 sin autenticación. Clave opcional de 32 bytes en Base64.",
    AlgorithmTag.RSA: f"RSA-2048 PKCS#1 v1.5. Siempre genera un par nuevo; máximo {RSA_MAX_PLAINTEXT} bytes.",
}

st.title("🔒 Cifrar mensaje")

# Comprueba que la sesión autenticada esté disponible antes de continuar.
uc = st.session_state.get("user_ctx")
if not uc or "username" not in uc:
    st.warning("Inicia sesión primero en la página de **Registro y Login**.")
    st.stop()

# El selector queda fuera del formulario para actualizar la ayuda al instante.
algorithm = st.selectbox(
    "Algoritmo",
    list(AlgorithmTag),
    format_func=lambda tag: tag.value,
)
st.caption(ALGORITHM_HELP[algorithm])


def _fill_generated_key() -> None:
    st.session_state["enc_key"] = engine.generate_key_text(algorithm) or ""


# La clave vive fuera del formulario para poder rellenarla con el botón.
col_key, col_gen = st.columns([4, 1])
key = col_key.text_input(
    "Clave (Base64, opcional)",
    type="password",
    key="enc_key",
    disabled=algorithm is AlgorithmTag.RSA,
)
col_gen.button(
    "Generar clave",
    on_click=_fill_generated_key,
    disabled=algorithm is AlgorithmTag.RSA,
)

with st.form("encrypt_form"):
    title = st.text_input("Título")
    message = st.text_area("Mensaje")
    submitted = st.form_submit_button("Cifrar")

if submitted:
    result = encrypt_message(uc["username"], title, message, key or None, algorithm.value)
    if result.ok:
        data = result.data
        st.success(f"Mensaje #{data['id']} cifrado con {data['algorithm']}.")
        st.markdown("### Texto cifrado")
        st.code(data["ciphertext"])
        # SECURITY: la clave solo se muestra aquí; guárdala para poder descifrar.
        st.markdown("### Clave")
        st.code(data["key"])
        if data["iv_or_nonce"] is not None:
            st.markdown("### IV / nonce")
            st.code(data["iv_or_nonce"])
    else:
        st.error(f"[{result.error_kind or result.status}] {result.error}")
