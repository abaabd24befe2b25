"""
Signature verification service.

Recovers the wallet that signed a canonical message (EIP-191 personal_sign),
proving request authenticity without passwords.
"""

from eth_account import Account
from eth_account.messages import encode_defunct
from eth_utils import to_checksum_address
from loguru import logger

from expeditions.utils.exceptions import InvalidSignature
from expeditions.utils.security import mask_address, mask_signature


class SignatureService:
    """Verifies signed wallet requests."""

    def recover_address(
        self,
        message: str,
        signature: str,
        expected_address: str | None = None,
    ) -> str:
        """
        Recover the signer of ``message``.

        Args:
            message: Plaintext message the wallet signed
            signature: Hex signature
            expected_address: Address the signer must match, if known

        Returns:
            Checksummed signer address

        Raises:
            InvalidSignature: If recovery fails or the signer is not
                ``expected_address``
        """
        if not signature:
            raise InvalidSignature()

        try:
            recovered = Account.recover_message(
                encode_defunct(text=message), signature=signature
            )
        except Exception as e:
            logger.debug(
                f"Signature recovery failed for {mask_signature(signature)}: {e}"
            )
            raise InvalidSignature() from e

        signer = to_checksum_address(recovered)

        if expected_address is not None:
            try:
                expected = to_checksum_address(expected_address)
            except ValueError as e:
                raise InvalidSignature() from e
            if signer != expected:
                logger.info(
                    f"Signature signer {mask_address(signer)} does not match "
                    f"{mask_address(expected)}"
                )
                raise InvalidSignature()

        return signer
