# ENS ReverseRecords on mainnet, getNames(address[]) for address -> name
ENS_REVERSE_RECORDS_ADDRESS = "0x3671aE578E63FdF66ad4F3E12CC0c0d71Ac7510C"

# ENS Registry on mainnet, resolver(bytes32) for name -> resolver
ENS_REGISTRY_ADDRESS = "0x00000000000C2E074eC69A0dFb2997BA6C7d2e1e"

# bytes32(uint256(keccak256('eip1967.proxy.implementation')) - 1)
EIP1967_IMPLEMENTATION_SLOT = "0x360894a13ba1a3210667c828492db98dca3e2076cc3735a920a3ca505d382bbc"
